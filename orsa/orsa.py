import math as m

import numpy as np


class _Settings:

    def __init__(self):
        self.do_local_refinement = True                  # 找到有意义模型后是否只在其内点中采样
        self.max_iteration_number = 1000                 # 全局最大迭代次数
        self.reserved_iteration_ratio = 0.1              # 为内点采样保留的迭代比例
        self.refinement_inlier_factor = 2.5              # 内点数超过该倍数的样本数时开始内点采样
        self.max_threshold = 0.0                         # 阈值上限（像素），不大于 0 表示不设上限


class _Statistics:

    def __init__(self):
        self.iteration_number = 0
        self.refinement_iteration = -1                   # 开始内点采样时的迭代序号
        self.threshold = 0.0                             # 选择的内点阈值（像素）
        self.nfa = m.inf                                 # 最佳模型的 log10(NFA)


class ORSA:
    """ a-contrario RANSAC (ORSA)

    同时在最小样本和内点数目上搜索，选择误报数 NFA 最小的组合，
    阈值由数据决定而不是人为给定。

    alpha0_left, alpha0_right 为随机点落入距两幅图像中极线一个像素以内的概率。
    """

    def __init__(self, alpha0_left, alpha0_right):
        self.settings = _Settings()
        self.statistics = _Statistics()

        self.log_alpha0 = np.array([m.log10(alpha0_left), m.log10(alpha0_right)])
        # 误差为距离平方，log(alpha) 中距离的指数为 1/2
        self.mult_error = 0.5

        self.estimator = None
        self.main_sampler = None
        self.point_number = 0
        self.sample_number = 0

    def run(self,
            estimator,
            main_sampler):
        """ 运行 ORSA 求解过程

        参数
        ----------
        estimator : Estimator
            模型的估计器
        main_sampler : Sampler
            全局采样器

        返回
        ----------
        float, Model, list(int), float
            最小的 log10(NFA)（未找到模型时为 inf），最佳模型，内点序号列表，
            选择的内点阈值（像素）
        """
        self.statistics = _Statistics()
        self.estimator = estimator
        self.main_sampler = main_sampler
        self.point_number = estimator.pointNumber()
        self.sample_number = estimator.sampleSize()

        if self.point_number <= self.sample_number:
            return m.inf, None, [], self.settings.max_threshold

        # 预先计算组合数的对数表和 log(e0)
        self.log_combi_n = self.__logCombinations(self.point_number)
        self.log_combi_k = self.__logCombinationsOfSample(self.point_number)
        self.log_e0 = m.log10(estimator.maximumModelNumber() * (self.point_number - self.sample_number))

        if self.settings.max_threshold > 0:
            max_squared_threshold = self.settings.max_threshold ** 2
        else:
            max_squared_threshold = m.inf

        # 为内点采样保留部分迭代
        iteration_number = self.settings.max_iteration_number
        reserved_number = 0
        if self.settings.do_local_refinement:
            reserved_number = int(iteration_number * self.settings.reserved_iteration_ratio)
            iteration_number -= reserved_number

        minimum_nfa = m.inf
        best_model = None
        best_inliers = []
        best_squared_threshold = 0.0

        pool = list(range(self.point_number))

        while self.statistics.iteration_number < iteration_number:
            self.statistics.iteration_number += 1

            sample = self.main_sampler.sample(pool, self.sample_number)
            if len(sample) == 0:
                continue

            better = False
            for model in self.estimator.estimateModel(sample):
                squared_errors, sides = self.estimator.errors(model)
                nfa, inliers, squared_threshold = self.__bestNFA(squared_errors,
                                                                 sides,
                                                                 max_squared_threshold)
                if nfa < minimum_nfa:
                    better = True
                    minimum_nfa = nfa
                    best_model = model
                    best_inliers = inliers
                    best_squared_threshold = squared_threshold

            # 找到有意义的模型后，在剩余的保留迭代中只从其内点采样
            if better and minimum_nfa < 0 and reserved_number > 0 and \
                    len(best_inliers) > self.settings.refinement_inlier_factor * self.sample_number:
                self.statistics.refinement_iteration = self.statistics.iteration_number
                iteration_number = self.statistics.iteration_number + reserved_number
                reserved_number = 0
                pool = list(best_inliers)

        self.statistics.nfa = minimum_nfa
        if best_model is None:
            self.statistics.threshold = self.settings.max_threshold
        else:
            self.statistics.threshold = m.sqrt(best_squared_threshold)
        return minimum_nfa, best_model, sorted(best_inliers), self.statistics.threshold

    def __bestNFA(self, squared_errors, sides, max_squared_threshold):
        """ 对一个模型，在所有可能的内点数目中寻找最小的 NFA

        参数
        ----------
        squared_errors : numpy
            所有点的误差平方
        sides : numpy
            误差所在的图像
        max_squared_threshold : float
            误差平方的上限

        返回
        ----------
        float, list, float
            最小的 log10(NFA)，对应的内点序号列表，对应的误差平方阈值
        """
        order = np.argsort(squared_errors, kind='stable')
        sorted_errors = squared_errors[order]
        sorted_sides = sides[order]

        k0 = self.sample_number
        # 候选内点数目 k = k0+1 ... n，第 k 个误差决定阈值
        k = np.arange(k0 + 1, self.point_number + 1)
        errors_k = sorted_errors[k - 1]
        with np.errstate(divide='ignore', invalid='ignore'):
            log_alpha = self.log_alpha0[sorted_sides[k - 1]] + \
                self.mult_error * np.log10(errors_k + np.finfo(np.float32).eps)
            log_nfa = self.log_e0 + log_alpha * (k - k0) + self.log_combi_n[k] + self.log_combi_k[k]
        log_nfa[~(errors_k <= max_squared_threshold)] = m.inf
        log_nfa[np.isnan(log_nfa)] = m.inf

        best = int(np.argmin(log_nfa))
        if not np.isfinite(log_nfa[best]):
            return m.inf, [], 0.0
        inlier_number = int(k[best])
        return float(log_nfa[best]), order[:inlier_number].tolist(), float(errors_k[best])

    def __logCombinations(self, n):
        """ log10(C(n, k))，k = 0 ... n """
        return np.array([(m.lgamma(n + 1) - m.lgamma(k + 1) - m.lgamma(n - k + 1)) / m.log(10)
                         for k in range(n + 1)])

    def __logCombinationsOfSample(self, n):
        """ log10(C(k, k0))，k = 0 ... n，k < k0 时为 0 """
        k0 = self.sample_number
        return np.array([(m.lgamma(k + 1) - m.lgamma(k0 + 1) - m.lgamma(k - k0 + 1)) / m.log(10)
                         if k >= k0 else 0.0
                         for k in range(n + 1)])
