# src/hatetris/agents/__init__.py
from .heuristic_agent import HeuristicAgent, HeuristicWeights

__all__ = ["HeuristicAgent", "HeuristicWeights"]
