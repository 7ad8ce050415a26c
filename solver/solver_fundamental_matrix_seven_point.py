import numpy as np

from model import FundamentalMatrix
from solver.solver_engine import SolverEngine


class SolverFundamentalMatrixSevenPoint(SolverEngine):
	""" 七点法求解基础矩阵模型参数 """

	def __init__(self, degeneracy_tolerance=1e-12):
		# 第七个奇异值相对最大奇异值的下限，低于它认为解空间退化
		self.degeneracy_tolerance = degeneracy_tolerance

	def returnMultipleModels(self):
		""" 确定是否有可能返回多个模型 """
		return True

	def maximumSolutions(self):
		""" 三次方程最多有三个实根 """
		return 3

	def sampleSize(self):
		""" 模型参数估计所需的最小样本数 """
		return 7

	def estimateModel(self,
					  points,
					  sample,
					  sample_number,
					  weights=None):
		""" 从给定的样本点拟合模型参数，点坐标应已归一化

		参数
		----------
		points : numpy
			输入的数据点集
		sample : list
			用于估计模型的样本点序号列表，为 None 时使用前 sample_number 个点
		sample_number : int
			样本点的数目
		weights : list 可选
			数据点集中点的对应权重

		返回
		----------
		list(Model)
			通过样本估计的模型列表，退化样本返回空列表
		"""
		if sample is None:
			sample = list(range(sample_number))
		if sample_number < self.sampleSize():
			return []

		''' 1. 求线性解 F1, F2 '''
		# 约束 x1' * F * x2 = 0，每个点对构成一行
		coefficients = np.zeros([sample_number, 9])
		for i in range(sample_number):
			sample_idx = sample[i]
			weight = 1.0 if weights is None else weights[sample_idx]
			x1, y1, x2, y2 = points[sample_idx][0:4]
			coefficients[i] = np.array(
				[x1 * x2, x1 * y2, x1, y1 * x2, y1 * y2, y1, x2, y2, 1.0]) * weight

		# A*(f11 f12 ... f33)' = 0 有 7 个方程 9 个未知数，
		# 解空间是二维的，取最后两个右奇异向量作为基
		_, Sigma, VT = np.linalg.svd(coefficients)
		# 零空间维数大于 2 说明样本退化（例如重复点或共线）
		if Sigma[0] <= 0 or Sigma[6] <= self.degeneracy_tolerance * Sigma[0]:
			return []
		f1 = np.reshape(VT[-2], (3, 3))
		f2 = np.reshape(VT[-1], (3, 3))

		''' 2. 秩为 2 约束 det(lambda*F1 + (1-lambda)*F2) = 0 '''
		# 行列式是 lambda 的三次多项式，用四个采样点精确确定其系数
		lambdas = np.array([-1.0, 0.0, 1.0, 2.0])
		determinants = [np.linalg.det(f2 + l * (f1 - f2)) for l in lambdas]
		c = np.polyfit(lambdas, determinants, 3)

		# 解三次方程；可以有1到3个根
		roots = np.roots(c)
		real_roots = roots[np.abs(roots.imag) < 1e-8].real
		if len(real_roots) < 1 or len(real_roots) > 3:
			return []

		''' 3. 对每个实根求解基础矩阵 '''
		models = []
		for root in real_roots:
			f = root * f1 + (1.0 - root) * f2
			norm = np.linalg.norm(f)
			if norm < 1e-20:
				continue
			models.append(FundamentalMatrix(matrix=f / norm))
		return models
