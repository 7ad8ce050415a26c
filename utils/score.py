import numpy as np


class Score:
    """ RANSAC Scoring """

    def __init__(self):
        self.inlier_number = 0   # 内点数目
        self.value = 0.0         # 截断二次损失得分，内点数相同时用于比较

    def __lt__(self, v):
        return (self.inlier_number, self.value) < (v.inlier_number, v.value)

    def __gt__(self, v):
        return v < self

    def __eq__(self, v):
        return self.inlier_number == v.inlier_number and self.value == v.value


class RansacScoringFunction:
    """ 以内点数目为主、截断二次损失为辅的评分函数 """

    def getScore(self, estimator, model, threshold):
        """ 求解模型对应的评估得分

        参数
        ----------
        estimator : Estimator
            模型的估计器
        model : Model
            当前模型参数
        threshold : float
            决定内点和外点的阈值（像素）

        返回
        ----------
        Score, list
            当前模型参数的评估得分
            当前模型参数的对应内点
        """
        score = Score()
        squared_threshold = threshold ** 2
        squared_residuals, _ = estimator.errors(model)

        # 残差不超过阈值的点为内点
        mask = squared_residuals <= squared_threshold
        inliers = np.flatnonzero(mask).tolist()
        score.inlier_number = len(inliers)
        if squared_threshold > 0:
            # 加分: 原始截断二次损失如下：1 - 残差^2/阈值^2
            score.value = float(np.sum(1.0 - squared_residuals[mask] / squared_threshold))
        return score, inliers
