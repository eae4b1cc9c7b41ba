# workflows/__init__.py
from .build_workflow import BuildWorkflow

__all__ = ['BuildWorkflow']
