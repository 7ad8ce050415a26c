import numpy as np

from model import Match


def loadMatches(path):
    """ 从文本文件读取特征点匹配，每行为 x1 y1 x2 y2

    参数
    --------
    path : str
        匹配文件路径

    返回
    --------
    list(Match)
        读取的匹配列表
    """
    data = np.loadtxt(path, dtype=np.float64, ndmin=2)
    if data.size == 0:
        return []
    if np.shape(data)[1] != 4:
        raise ValueError(f'{path}: expected 4 columns per match, got {np.shape(data)[1]}')
    return [Match(*row) for row in data.tolist()]


def saveMatches(path, matches):
    """ 将特征点匹配写入文本文件，格式与 loadMatches 相同 """
    data = np.asarray(matches, dtype=np.float64).reshape(-1, 4)
    np.savetxt(path, data, fmt='%.10g')
