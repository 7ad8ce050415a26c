class Estimator:
    """ 模型估计器基类

    估计器在一次求解中独占其数据，可用作上下文管理器，
    离开 with 块时（包括提前返回）释放数据。
    """

    def __init__(self):
        self.released = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False

    def release(self):
        """ 释放估计器持有的数据 """
        self.released = True

    def sampleSize(self):
        """ 估计模型所需的最小样本的大小 """
        pass

    def nonMinimalSampleSize(self):
        """ 估计模型所需的非最小样本的大小 """
        pass

    def maximumModelNumber(self):
        """ 一个最小样本最多估计出的模型数目 """
        return 1

    def pointNumber(self):
        """ 数据点的数目 """
        pass

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
        pass

    def estimateModelNonminimal(self, sample, weights=None):
        """ 根据数据点集的非最小采样估计模型
            对于一条直线，在一组点上使用SVD而不是从两点构造一条直线。
            在加权最小二乘的情况下，权重可以输入到函数中

        参数
        ----------
        sample : list
            用于估计模型的样本点序号列表
        weights : list
            数据点集中点的对应权重

        返回
        ----------
        list(Model)
            通过样本估计的模型列表
        """
        pass

    def computeModel(self, indices):
        """ 用给定序号的全部点拟合一个模型

        返回
        ----------
        bool, numpy
            是否拟合成功，拟合的模型矩阵
        """
        pass

    def errors(self, model):
        """ 给定模型，计算所有数据点的误差平方及误差所在的图像 """
        pass
