import numpy as np

from model import FundamentalMatrix, Model, matchesToPoints
from solver import (SolverFundamentalMatrixEightPoint,
                    SolverFundamentalMatrixSevenPoint)

from .estimator import Estimator


class EstimatorFundamental(Estimator):
    """ 基础矩阵估计器

    数据点在构造时固定。求解器在按图像尺寸归一化的坐标上工作，
    返回的模型和误差都在像素坐标下，约定 x1' * F * x2 = 0。
    """

    def __init__(self,
                 points,
                 w1, h1, w2, h2,
                 normalize=True,
                 minimalSolver=SolverFundamentalMatrixSevenPoint,
                 nonMinimalSolver=SolverFundamentalMatrixEightPoint):
        super().__init__()
        # 用于估计最小样本模型的估计器
        self.minimal_solver = minimalSolver()
        # 用于估计非最小样本模型的估计器
        self.non_minimal_solver = nonMinimalSolver()

        self.points = matchesToPoints(points)
        self.point_number = np.shape(self.points)[0]

        # 源图像与目标图像的归一化转换
        if normalize:
            self.normalizing_transform_src = self.__normalizingTransform(w1, h1)
            self.normalizing_transform_dst = self.__normalizingTransform(w2, h2)
        else:
            self.normalizing_transform_src = np.eye(3)
            self.normalizing_transform_dst = np.eye(3)
        self.normalized_points = self.__normalizePoints(self.points)

    def release(self):
        """ 释放估计器持有的数据 """
        super().release()
        self.points = None
        self.normalized_points = None

    def sampleSize(self):
        """ 估计模型所需的最小样本的大小 """
        return self.minimal_solver.sampleSize()

    def nonMinimalSampleSize(self):
        """ 估计模型所需的非最小样本的大小 """
        return self.non_minimal_solver.sampleSize()

    def maximumModelNumber(self):
        """ 一个最小样本最多估计出的模型数目 """
        return self.minimal_solver.maximumSolutions()

    def pointNumber(self):
        return self.point_number

    ''' 模型估计函数 '''
    def estimateModel(self, sample):
        """ 给定一组数据点，估计最小样本模型

        参数
        ----------
        sample : list
            用于估计模型的样本点序号列表

        返回
        ----------
        list(Model)
            通过样本估计的模型列表
        """
        models = self.minimal_solver.estimateModel(self.normalized_points,
                                                   sample,
                                                   len(sample))
        return [self.__denormalizeModel(model) for model in models]

    def estimateModelNonminimal(self, sample, weights=None):
        """ 根据数据点集的非最小采样估计模型

        参数
        ----------
        sample : list
            用于估计模型的样本点序号列表
        weights : list
            数据点集中点的对应权重

        返回
        ----------
        list(Model)
            通过样本估计的模型列表，样本不足或退化时为空
        """
        if len(sample) < self.nonMinimalSampleSize():
            return []
        models = self.non_minimal_solver.estimateModel(self.normalized_points,
                                                       sample,
                                                       len(sample),
                                                       weights=weights)
        return [self.__denormalizeModel(model) for model in models]

    def computeModel(self, indices):
        """ 用给定序号的全部点拟合一个模型

        恰好为最小样本时使用七点法，多于最小样本时使用最小二乘法。

        参数
        ----------
        indices : list
            用于拟合的点序号列表

        返回
        ----------
        bool, numpy
            是否拟合成功，拟合的基础矩阵（失败时为 None）
        """
        indices = list(indices)
        if len(indices) < self.sampleSize():
            return False, None
        if len(indices) == self.sampleSize():
            models = self.estimateModel(indices)
        else:
            models = self.estimateModelNonminimal(indices)
        if len(models) == 0:
            return False, None

        # 多个解时选择在样本上误差最小的模型
        best_model = min(models, key=lambda model: np.sum(self.errors(model)[0][indices]))
        return True, best_model.descriptor

    ''' 给定模型，计算误差 '''
    def errors(self, model):
        """ 所有点到两幅图像中对应极线距离平方的较大值

        参数
        ----------
        model : Model 或 numpy
            基础矩阵模型

        返回
        ----------
        numpy, numpy
            每个点的误差平方，误差所在的图像（0 为源图像，1 为目标图像）
        """
        descriptor = model.descriptor if isinstance(model, Model) else np.asarray(model)
        ones = np.ones([self.point_number, 1])
        x1 = np.hstack((self.points[:, 0:2], ones))
        x2 = np.hstack((self.points[:, 2:4], ones))

        # 目标图像中的极线 F' * x1，源图像中的极线 F * x2
        line_dst = np.dot(x1, descriptor)
        line_src = np.dot(x2, descriptor.T)
        d2 = np.sum(line_dst * x2, axis=1) ** 2

        with np.errstate(divide='ignore', invalid='ignore'):
            error_dst = d2 / (line_dst[:, 0] ** 2 + line_dst[:, 1] ** 2)
            error_src = d2 / (line_src[:, 0] ** 2 + line_src[:, 1] ** 2)
        # 极线退化时误差为无穷大
        error_dst[~np.isfinite(error_dst)] = np.inf
        error_src[~np.isfinite(error_src)] = np.inf

        sides = np.where(error_dst > error_src, 1, 0)
        return np.maximum(error_src, error_dst), sides

    ''' 归一化工具函数 '''
    def __normalizingTransform(self, width, height):
        """ 把图像中心移到原点，并把较长边缩放到 [-1, 1] """
        size = max(width, height)
        if size <= 0:
            return np.eye(3)
        ratio = 2.0 / size
        return np.array([[ratio, 0, -ratio * width / 2.0],
                         [0, ratio, -ratio * height / 2.0],
                         [0, 0, 1]])

    def __normalizePoints(self, points):
        normalized_points = np.zeros([self.point_number, 4])
        ones = np.ones(self.point_number)
        src = np.dot(self.normalizing_transform_src, np.vstack((points[:, 0:2].T, ones)))
        dst = np.dot(self.normalizing_transform_dst, np.vstack((points[:, 2:4].T, ones)))
        normalized_points[:, 0:2] = src[0:2].T
        normalized_points[:, 2:4] = dst[0:2].T
        return normalized_points

    def __denormalizeModel(self, model):
        """ 基础矩阵的反归一化 F = N1' * Fn * N2 """
        descriptor = np.dot(np.dot(self.normalizing_transform_src.T, model.descriptor),
                            self.normalizing_transform_dst)
        return FundamentalMatrix(matrix=descriptor / np.linalg.norm(descriptor))
