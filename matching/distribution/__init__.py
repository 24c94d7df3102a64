"""Distribution Module - Balanced selection of scored jobs."""
from matching.distribution.selector import BalancedDistributionSelector

__all__ = ['BalancedDistributionSelector']
