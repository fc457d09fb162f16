"""
Steps concretos fornecidos com o Atlas BuildFlow.

Steps vivem fora do core: o engine só conhece o contrato `Step`.
"""

from .collect_build_env import BuildEnvInfo, CollectBuildEnvStep, collect_build_env

__all__ = ["BuildEnvInfo", "CollectBuildEnvStep", "collect_build_env"]
