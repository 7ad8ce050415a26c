from .solver_engine import SolverEngine
from .solver_fundamental_matrix_eight_point import SolverFundamentalMatrixEightPoint
from .solver_fundamental_matrix_seven_point import SolverFundamentalMatrixSevenPoint
