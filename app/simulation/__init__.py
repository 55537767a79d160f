from .network_analyzer import AnalysisResult, AnalysisSettings, NetworkAnalyzer
from .path_finder import PathHop, find_circuit_paths
from .state_projector import CircuitState, ComponentState, WireState, project_state

__all__ = [
    'AnalysisResult',
    'AnalysisSettings',
    'NetworkAnalyzer',
    'PathHop',
    'find_circuit_paths',
    'CircuitState',
    'ComponentState',
    'WireState',
    'project_state',
]
