import logging
import math as m
from collections import namedtuple
from dataclasses import dataclass, field
from enum import Enum

from estimator import EstimatorFundamental
from model import matchesToPoints
from ransac import RANSAC
from sampler import UniformSampler

from .error_statistics import aggregate
from .orsa import ORSA

logger = logging.getLogger(__name__)


class EstimationStatus(Enum):
    """ 基础矩阵估计的结果状态 """
    SUCCESS = 'success'
    INSUFFICIENT_SAMPLES = 'insufficient_samples'     # 匹配数目不足，未进行估计
    NO_MEANINGFUL_MODEL = 'no_meaningful_model'       # ORSA 未找到 NFA < 1 的模型


class RefinementStatus(Enum):
    """ 用全部内点重新估计模型的结果状态 """
    ACCEPTED = 'accepted'
    FAILED = 'failed'         # 内点无法拟合模型，保留原模型
    REJECTED = 'rejected'     # 拟合后的平均误差超过原模型的最大误差，保留原模型


RefinementResult = namedtuple('RefinementResult', ['model', 'status', 'before', 'after'])


@dataclass
class FundamentalResult:
    """ 基础矩阵估计结果

    Attributes:
        status: 估计的结果状态
        F: 基础矩阵，未找到模型时为 None
        inliers: 内点序号列表
        precision: 内点阈值（像素），ORSA 下为数据选择的阈值
        required_matches: 匹配不足时所需的最少匹配数目
        iterations: 实际使用的迭代次数
        nfa: ORSA 最佳模型的 log10(NFA)
        refinement: 最终优化的结果状态
        error_before: 优化前内点的 (平均, 最大) 误差
        error_after: 优化后内点的 (平均, 最大) 误差
    """

    status: EstimationStatus
    F: object = None
    inliers: list = field(default_factory=list)
    precision: float = 0.0
    required_matches: int = 0
    iterations: int = 0
    nfa: float = m.inf
    refinement: RefinementStatus = None
    error_before: tuple = None
    error_after: tuple = None

    @property
    def ok(self):
        return self.status is EstimationStatus.SUCCESS

    def __bool__(self):
        return self.ok


def buildModel(points, w1, h1, w2, h2):
    """ 为给定的匹配和图像尺寸构建基础矩阵估计器（启用归一化） """
    if min(w1, h1, w2, h2) <= 0:
        raise ValueError(f"image sizes must be positive, got {w1}x{h1} and {w2}x{h2}")
    return EstimatorFundamental(points, w1, h1, w2, h2, normalize=True)


def refine(estimator, matches, inliers, F):
    """ 用全部内点重新估计基础矩阵

    当重新估计的平均误差不超过原模型在内点上的最大误差时采用新模型，
    否则保留原模型。内点集合不变。

    参数
    --------
    estimator : Estimator
        模型的估计器
    matches : list(Match) 或 numpy
        特征点匹配列表
    inliers : list(int)
        内点序号列表
    F : numpy
        当前基础矩阵

    返回
    --------
    RefinementResult
        优化后的模型，优化状态，优化前后的 (平均, 最大) 误差
    """
    if F is None or len(inliers) == 0:
        logger.warning("Warning: no inliers to refine, result is suspect")
        return RefinementResult(F, RefinementStatus.FAILED, None, None)

    before = aggregate(matches, inliers, F)
    logger.info("Before refinement: Average/max error: %g/%g", *before)

    # 用全部内点重新估计
    ok, candidate = estimator.computeModel(inliers)
    if not ok:
        logger.warning("Warning: error in refinement, result is suspect")
        return RefinementResult(F, RefinementStatus.FAILED, before, None)

    after = aggregate(matches, inliers, candidate)
    logger.info("After  refinement: Average/max error: %g/%g", *after)
    if after[0] <= before[1]:
        return RefinementResult(candidate, RefinementStatus.ACCEPTED, before, after)

    logger.warning("Warning: error after refinement is too large, thus ignored")
    return RefinementResult(F, RefinementStatus.REJECTED, before, after)


def ransacFundamental(matches, w1, h1, w2, h2, precision, max_iterations, beta, seed=None):
    """ 用 RANSAC 和最终优化估计基础矩阵

    参数
    --------
    matches : list(Match) 或 numpy
        特征点匹配列表
    w1, h1 : int, int
        源图像宽度和高度
    w2, h2 : int, int
        目标图像宽度和高度
    precision : float
        决定内点和外点的阈值（像素）
    max_iterations : int
        RANSAC算法最大迭代次数
    beta : float
        至少采到一个全内点样本的概率，用于自适应调整迭代次数
    seed : int 可选
        采样器的随机种子

    返回
    --------
    FundamentalResult
        匹配足够时状态为 SUCCESS，表示已进行估计，模型质量需由内点和误差判断
    """
    points = matchesToPoints(matches)
    with buildModel(points, w1, h1, w2, h2) as estimator:
        sample_size = estimator.sampleSize()
        if estimator.pointNumber() < sample_size:
            logger.error("Error: RANSAC needs %d matches or more to proceed", sample_size)
            return FundamentalResult(EstimationStatus.INSUFFICIENT_SAMPLES,
                                     precision=precision,
                                     required_matches=sample_size)

        ransac = RANSAC()
        ransac.settings.threshold = precision
        ransac.settings.max_iteration_number = max_iterations
        ransac.settings.confidence = beta
        ransac.settings.do_local_optimization = True

        model, inliers = ransac.run(estimator, UniformSampler(points, seed))
        logger.info("Iterations: %d", ransac.statistics.iteration_number)

        F = None if model is None else model.descriptor
        refinement = refine(estimator, points, inliers, F)

        return FundamentalResult(EstimationStatus.SUCCESS,
                                 F=refinement.model,
                                 inliers=inliers,
                                 precision=precision,
                                 iterations=ransac.statistics.iteration_number,
                                 refinement=refinement.status,
                                 error_before=refinement.before,
                                 error_after=refinement.after)


def orsaFundamental(matches, w1, h1, w2, h2, precision, max_iterations, seed=None):
    """ 用 ORSA 和最终优化估计基础矩阵

    如果优化后的平均误差超过 ORSA 结果的最大误差，则不采用优化结果。

    参数
    --------
    matches : list(Match) 或 numpy
        特征点匹配列表
    w1, h1 : int, int
        源图像宽度和高度
    w2, h2 : int, int
        目标图像宽度和高度
    precision : float
        内点阈值的上限（像素），不大于 0 表示不设上限
    max_iterations : int
        ORSA算法最大迭代次数
    seed : int 可选
        采样器的随机种子

    返回
    --------
    FundamentalResult
        未找到有意义（NFA < 1）的模型时状态为 NO_MEANINGFUL_MODEL，
        此时 F 为 None 且内点为空；成功时 precision 为 ORSA 选择的阈值
    """
    points = matchesToPoints(matches)
    with buildModel(points, w1, h1, w2, h2) as estimator:
        sample_size = estimator.sampleSize()
        if estimator.pointNumber() <= sample_size:
            logger.error("Error: ORSA needs %d matches or more to proceed", sample_size + 1)
            return FundamentalResult(EstimationStatus.INSUFFICIENT_SAMPLES,
                                     precision=precision,
                                     required_matches=sample_size + 1)

        # 图像对角线长度和面积
        diameter = m.sqrt(w1 * float(w1) + h1 * float(h1))
        area = w1 * float(h1)
        alpha0_left = 2.0 * diameter / area
        diameter = m.sqrt(w2 * float(w2) + h2 * float(h2))
        area = w2 * float(h2)
        alpha0_right = 2.0 * diameter / area

        orsa = ORSA(alpha0_left, alpha0_right)
        orsa.settings.max_iteration_number = max_iterations
        orsa.settings.max_threshold = precision
        orsa.settings.do_local_refinement = True

        nfa, model, inliers, threshold = orsa.run(estimator, UniformSampler(points, seed))
        logger.info("Iterations: %d, log10(NFA): %g, threshold: %g",
                    orsa.statistics.iteration_number, nfa, threshold)

        if nfa > 0.0:
            logger.warning("Warning: no meaningful model found")
            return FundamentalResult(EstimationStatus.NO_MEANINGFUL_MODEL,
                                     precision=precision,
                                     iterations=orsa.statistics.iteration_number,
                                     nfa=nfa)

        refinement = refine(estimator, points, inliers, model.descriptor)
        return FundamentalResult(EstimationStatus.SUCCESS,
                                 F=refinement.model,
                                 inliers=inliers,
                                 precision=threshold,
                                 iterations=orsa.statistics.iteration_number,
                                 nfa=nfa,
                                 refinement=refinement.status,
                                 error_before=refinement.before,
                                 error_after=refinement.after)
