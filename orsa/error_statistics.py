import math as m

import numpy as np

from model import matchesToPoints


def residuals(points, F):
    """ 每个匹配的第二个点到第一个点对应极线的距离平方

    参数
    --------
    points : numpy
        (n, 4) 的点集矩阵
    F : numpy
        基础矩阵，满足 x1' * F * x2 = 0

    返回
    --------
    numpy
        每个点的残差 d^2 / (a^2 + b^2)，其中 (a, b, c) = F' * x1，
        极线退化时为 inf
    """
    F = np.asarray(F, dtype=np.float64)
    x1 = np.hstack((points[:, 0:2], np.ones([np.shape(points)[0], 1])))
    # 第二幅图像中的极线 (a, b, c)
    lines = np.dot(x1, F)
    d = lines[:, 0] * points[:, 2] + lines[:, 1] * points[:, 3] + lines[:, 2]
    denominator = lines[:, 0] ** 2 + lines[:, 1] ** 2
    result = np.full(np.shape(points)[0], np.inf)
    np.divide(d ** 2, denominator, out=result, where=denominator > 0)
    return result


def residual(match, F):
    """ 单个匹配的极线残差，与 F 的非零缩放无关 """
    return float(residuals(matchesToPoints([tuple(match)[0:4]]), F)[0])


def aggregate(matches, inliers, F):
    """ 内点的平均（均方根）误差和最大误差

    参数
    --------
    matches : list(Match) 或 numpy
        特征点匹配列表
    inliers : list(int)
        内点序号列表
    F : numpy
        基础矩阵

    返回
    --------
    float, float
        rms = sqrt(残差均值)，max = sqrt(残差最大值)；内点为空时为 (0, 0)
    """
    if len(inliers) == 0:
        return 0.0, 0.0
    points = matchesToPoints(matches)[list(inliers)]
    errors = residuals(points, F)
    return m.sqrt(float(np.mean(errors))), m.sqrt(float(np.max(errors)))
