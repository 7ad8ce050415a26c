from collections import namedtuple

import numpy as np


# 一组特征点匹配：源图像坐标 (x1, y1)，目标图像坐标 (x2, y2)
Match = namedtuple('Match', ['x1', 'y1', 'x2', 'y2'])


class Model:
    """ RANSAC算法求解模型基类 """

    def __init__(self):
        self.descriptor = None


class FundamentalMatrix(Model):
    """ 特征点匹配的基础矩阵模型，满足 x1' * F * x2 = 0 """

    def __init__(self, matrix=None):
        super().__init__()
        self.descriptor = np.zeros([3, 3]) if matrix is None else np.asarray(matrix, dtype=np.float64)


def matchesToPoints(matches):
    """ 将匹配列表转换为 (n, 4) 的点集矩阵：src在前两列，dst在后两列

    参数
    --------
    matches : list(Match) 或 numpy
        特征点匹配列表

    返回
    --------
    numpy
        (n, 4) 的浮点矩阵
    """
    points = np.asarray(matches, dtype=np.float64)
    if points.size == 0:
        return np.zeros([0, 4])
    if points.ndim != 2 or np.shape(points)[1] != 4:
        raise ValueError(f'matches must have shape (n, 4), got {np.shape(points)}')
    return points
