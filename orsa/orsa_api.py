import numpy as np

from .orsa_fundamental import orsaFundamental, ransacFundamental

FM_ORSA = 'orsa'
FM_RANSAC = 'ransac'


def __transformInliersToMask(inliers, point_number):
    """ 转换 inliers 内点序号列表为 cv2 match 所需的 mask

    参数
    --------
    inliers : list
        内点序号列表
    point_number : int
        点集的数目

    返回
    --------
    numpy
        包含 0 1 的 mask
    """
    mask = np.zeros(point_number, dtype=np.uint8)
    mask[list(inliers)] = 1
    return mask


""" 用于特征点匹配，对应矩阵求解的函数 """
def findFundamentalMat(src_points, dst_points, h1, w1, h2, w2,
                       method=FM_ORSA, threshold=1.0, conf=0.99, max_iters=1000, seed=None):
    """ 基础矩阵求解

    参数
    --------
    src_points : numpy
        源图像特征点集合
    dst_points : numpy
        目标图像特征点集合
    h1, w1: int, int
        源图像高度和宽度
    h2, w2: int, int
        目标图像高度和宽度
    method : str
        FM_ORSA 自动选择阈值，FM_RANSAC 使用固定阈值
    threshold : float
        FM_RANSAC 下为内点阈值，FM_ORSA 下为阈值上限（像素）
    conf : float
        RANSAC置信参数
    max_iters : int
        算法最大迭代次数
    seed : int 可选
        采样器的随机种子

    返回
    --------
    numpy, numpy
        基础矩阵（x1' * F * x2 = 0），标注内点和外点的mask；失败时为 None, None
    """
    # 合并points到同个矩阵：
    # src在前两列，dst在后两列
    points = np.c_[np.asarray(src_points, dtype=np.float64).reshape(-1, 2),
                   np.asarray(dst_points, dtype=np.float64).reshape(-1, 2)]

    if method == FM_ORSA:
        result = orsaFundamental(points, w1, h1, w2, h2, threshold, max_iters, seed=seed)
    elif method == FM_RANSAC:
        result = ransacFundamental(points, w1, h1, w2, h2, threshold, max_iters, conf, seed=seed)
    else:
        raise ValueError(f'unknown method {method!r}, expected {FM_ORSA!r} or {FM_RANSAC!r}')

    if not result.ok or result.F is None:
        return None, None
    return result.F, __transformInliersToMask(result.inliers, np.shape(points)[0])
