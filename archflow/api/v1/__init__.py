from archflow.api.v1 import analysis, analyze, stream

__all__ = ["analysis", "analyze", "stream"]
