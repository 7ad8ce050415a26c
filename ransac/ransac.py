import math as m
import sys

from utils.score import RansacScoringFunction, Score


class _Settings:

    def __init__(self):
        self.do_local_optimization = True                # 是否需要局部优化拟合模型

        self.max_iteration_number = 10000                # 全局最大迭代次数
        self.max_local_optimization_number = 10          # 局部优化最大迭代次数

        self.confidence = 0.99                           # 至少采到一个全内点样本的概率
        self.threshold = 1.0                             # 决定内点和外点的阈值（像素）


class _Statistics:

    def __init__(self):
        self.iteration_number = 0
        self.local_optimization_number = 0


class RANSAC:
    """ 自适应迭代次数的 RANSAC 算法 """

    def __init__(self):
        # 设置初始化
        self.settings = _Settings()
        self.statistics = _Statistics()

        self.estimator = None
        self.point_number = 0
        self.sample_number = 0
        self.max_iteration = 0

        # 全局采样器
        self.main_sampler = None

        # 模型评估的评分函数
        self.scoring_function = RansacScoringFunction()

    def run(self,
            estimator,
            main_sampler):
        """ 运行 RANSAC 求解过程

        参数
        ----------
        estimator : Estimator
            模型的估计器
        main_sampler : Sampler
            全局采样器

        返回
        ----------
        Model, list(int)
            求解的最佳模型（未找到时为 None）和内点序号列表，
            实际迭代次数记录在 statistics.iteration_number
        """
        # 初始化参数赋值
        self.statistics = _Statistics()
        self.estimator = estimator
        self.main_sampler = main_sampler
        self.point_number = estimator.pointNumber()
        self.sample_number = estimator.sampleSize()

        ''' The main RANSAC iteration '''

        # 记录全局的最佳模型，得分，内点集合
        so_far_the_best_model = None
        so_far_the_best_score = Score()
        so_far_the_best_inliers = []

        # 初始化采样池
        pool = list(range(self.point_number))

        self.max_iteration = self.settings.max_iteration_number
        while self.statistics.iteration_number < self.max_iteration:
            # 增加迭代计算次数
            self.statistics.iteration_number += 1

            # Sk ← Draw a minimal sample
            sample = self.main_sampler.sample(pool, self.sample_number)
            if len(sample) == 0:
                continue

            # θk ← Estimate a model using Sk
            models = self.estimator.estimateModel(sample)

            for model in models:
                # wk ← Compute the support of θk
                score, inliers = self.scoring_function.getScore(self.estimator,
                                                                model,
                                                                self.settings.threshold)
                if not so_far_the_best_score < score:
                    continue

                # θ∗, L∗, w∗ ← θk, Lk, wk
                so_far_the_best_model = model
                so_far_the_best_score = score
                so_far_the_best_inliers = inliers

                if self.settings.do_local_optimization:
                    so_far_the_best_model, so_far_the_best_inliers, so_far_the_best_score = \
                        self.__localOptimization(so_far_the_best_model,
                                                 so_far_the_best_inliers,
                                                 so_far_the_best_score)

                # 更新最大迭代数
                self.max_iteration = min(self.max_iteration,
                                         self.__getIterationNumber(so_far_the_best_score.inlier_number))

        # Output: θ - model parameters; L – labeling
        return so_far_the_best_model, so_far_the_best_inliers

    def __localOptimization(self,
                            so_far_the_best_model,
                            so_far_the_best_inliers,
                            so_far_the_best_score):
        """ 用当前内点进行最小二乘拟合，直到内点集合不再改善

        参数
        ----------
        so_far_the_best_model : Model
            最佳模型参数
        so_far_the_best_inliers : list
            最佳内点序号列表
        so_far_the_best_score : Score
            最佳模型评估得分

        返回
        ----------
        Model, list, Score
            局部优化最佳模型，最佳内点，最佳得分
        """
        for _ in range(self.settings.max_local_optimization_number):
            models = self.estimator.estimateModelNonminimal(so_far_the_best_inliers)
            if len(models) == 0:
                break
            self.statistics.local_optimization_number += 1

            changed = False
            for model in models:
                score, inliers = self.scoring_function.getScore(self.estimator,
                                                                model,
                                                                self.settings.threshold)
                if so_far_the_best_score < score:
                    so_far_the_best_model = model
                    so_far_the_best_inliers = inliers
                    so_far_the_best_score = score
                    changed = True
            if not changed:
                break

        return so_far_the_best_model, so_far_the_best_inliers, so_far_the_best_score

    # H(|L∗|, µ)
    def __getIterationNumber(self, inlier_number):
        """ 计算当前内点数目期望的迭代数目 """
        Pi = (float(inlier_number) / self.point_number) ** self.sample_number
        if Pi < sys.float_info.epsilon:
            return sys.maxsize
        if Pi > 1.0 - sys.float_info.epsilon:
            return 1
        if self.settings.confidence >= 1.0:
            return sys.maxsize
        log1 = m.log(1.0 - self.settings.confidence)
        log2 = m.log(1.0 - Pi)
        return int(m.ceil(log1 / log2))
