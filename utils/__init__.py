from .match_io import loadMatches, saveMatches
from .score import RansacScoringFunction, Score
from .uniform_random_generator import UniformRandomGenerator
