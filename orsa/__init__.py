from .error_statistics import aggregate, residual, residuals
from .orsa import ORSA
from .orsa_api import FM_ORSA, FM_RANSAC, findFundamentalMat
from .orsa_fundamental import (EstimationStatus, FundamentalResult,
                               RefinementResult, RefinementStatus, buildModel,
                               orsaFundamental, ransacFundamental, refine)
