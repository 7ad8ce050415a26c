from .sampler import Sampler
from .uniform_sampler import UniformSampler
