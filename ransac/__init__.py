from .ransac import RANSAC
