from runfolia.orchestration.orchestrator import Orchestrator
from runfolia.orchestration.planner import LaunchPlanner

__all__ = ["LaunchPlanner", "Orchestrator"]
