import numpy as np

from model import FundamentalMatrix
from solver.solver_engine import SolverEngine


class SolverFundamentalMatrixEightPoint(SolverEngine):
	""" 八点法（最小二乘）求解基础矩阵模型参数 """

	def __init__(self, degeneracy_tolerance=1e-12):
		# 第八个奇异值相对最大奇异值的下限，低于它认为解空间退化
		self.degeneracy_tolerance = degeneracy_tolerance

	def returnMultipleModels(self):
		""" 确定是否有可能返回多个模型 """
		return False

	def sampleSize(self):
		""" 模型参数估计所需的最小样本数 """
		return 8

	def estimateModel(self,
					  points,
					  sample,
					  sample_number,
					  weights=None):
		""" 从给定的样本点，加权拟合模型参数

		参数
		----------
		points : numpy
			输入的数据点集，点坐标应已归一化
		sample : list
			用于估计模型的样本点序号列表，为 None 时使用前 sample_number 个点
		sample_number : int
			样本点的数目
		weights : list 可选
			数据点集中点的对应权重

		返回
		----------
		list(Model)
			通过样本估计的模型列表，退化时返回空列表
		"""
		if sample is None:
			sample = list(range(sample_number))
		if sample_number < self.sampleSize():
			return []

		# 构成线性系统：第 i 行表示方程 (m1[i], 1)' * F * (m2[i], 1) = 0
		coefficients = np.zeros([sample_number, 9])
		for i in range(sample_number):
			sample_idx = sample[i]
			weight = 1.0 if weights is None else weights[sample_idx]
			x1, y1, x2, y2 = points[sample_idx][0:4]

			weight_times_x1 = weight * x1
			weight_times_y1 = weight * y1

			coefficients[i, 0] = weight_times_x1 * x2
			coefficients[i, 1] = weight_times_x1 * y2
			coefficients[i, 2] = weight_times_x1
			coefficients[i, 3] = weight_times_y1 * x2
			coefficients[i, 4] = weight_times_y1 * y2
			coefficients[i, 5] = weight_times_y1
			coefficients[i, 6] = weight * x2
			coefficients[i, 7] = weight * y2
			coefficients[i, 8] = weight

		# 最小奇异值对应的右奇异向量为最小二乘解
		_, Sigma, VT = np.linalg.svd(coefficients)
		# 零空间维数大于 1 说明点的构型退化（例如共线）
		if Sigma[0] <= 0 or Sigma[7] <= self.degeneracy_tolerance * Sigma[0]:
			return []
		f = np.reshape(VT[-1], (3, 3))

		# 强制秩为 2
		U, S, VT = np.linalg.svd(f)
		S[2] = 0.0
		f = np.dot(U * S, VT)

		return [FundamentalMatrix(matrix=f / np.linalg.norm(f))]
