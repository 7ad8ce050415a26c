import numpy as np


""" 合成两视图数据模块 """
def rotationMatrix(rx, ry, rz):
    """ 依次绕 x, y, z 轴旋转的旋转矩阵 """
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    cz, sz = np.cos(rz), np.sin(rz)
    Rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    Ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    Rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return np.dot(Rz, np.dot(Ry, Rx))


def skew(v):
    return np.array([[0, -v[2], v[1]],
                     [v[2], 0, -v[0]],
                     [-v[1], v[0], 0]])


def makeTwoViewScene(inlier_number, outlier_number=0, w=640, h=480,
                     outlier_offset=(60.0, 120.0), noise=0.0, seed=0):
    """ 生成两个相机观察同一组三维点的匹配，外点沿极线法向偏移

    参数
    --------
    inlier_number : int
        内点数目，位于返回矩阵的前 inlier_number 行
    outlier_number : int
        外点数目，位于内点之后
    w, h : int, int
        图像宽度和高度
    outlier_offset : (float, float)
        外点到真实极线的距离范围（像素）
    noise : float
        内点的高斯噪声标准差（像素）
    seed : int
        随机种子

    返回
    --------
    numpy, numpy
        (n, 4) 的匹配矩阵，满足 x1' * F * x2 = 0 的真实基础矩阵
    """
    rng = np.random.default_rng(seed)
    K = np.array([[500.0, 0, w / 2.0], [0, 500.0, h / 2.0], [0, 0, 1]])
    R = rotationMatrix(0.05, 0.1, 0.02)
    t = np.array([1.0, 0.1, 0.05])

    # x2' * (K^-T [t]x R K^-1) * x1 = 0，转置后得到 x1' * F * x2 = 0
    K_inv = np.linalg.inv(K)
    F = np.dot(K_inv.T, np.dot(skew(t), np.dot(R, K_inv))).T
    F /= np.linalg.norm(F)

    point_number = inlier_number + outlier_number
    X = np.c_[rng.uniform(-2.0, 2.0, point_number),
              rng.uniform(-1.5, 1.5, point_number),
              rng.uniform(6.0, 10.0, point_number)]
    x1 = np.dot(K, X.T).T
    x2 = np.dot(K, (np.dot(R, X.T).T + t).T).T
    x1 = x1[:, 0:2] / x1[:, 2:3]
    x2 = x2[:, 0:2] / x2[:, 2:3]

    if noise > 0:
        x1[:inlier_number] += rng.normal(0.0, noise, (inlier_number, 2))
        x2[:inlier_number] += rng.normal(0.0, noise, (inlier_number, 2))

    # 外点：目标点沿极线法向移动
    for i in range(inlier_number, point_number):
        line = np.dot(np.r_[x1[i], 1.0], F)
        normal = line[0:2] / np.linalg.norm(line[0:2])
        offset = rng.uniform(*outlier_offset) * rng.choice([-1.0, 1.0])
        x2[i] += offset * normal

    return np.c_[x1, x2], F


def sameUpToScale(F, G, tol=1e-6):
    """ 判断两个基础矩阵在相差一个尺度（包括符号）时是否相同 """
    F = np.asarray(F) / np.linalg.norm(F)
    G = np.asarray(G) / np.linalg.norm(G)
    return min(np.linalg.norm(F - G), np.linalg.norm(F + G)) < tol
