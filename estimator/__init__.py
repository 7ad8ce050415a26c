from .estimator import Estimator
from .estimator_fundamental import EstimatorFundamental
