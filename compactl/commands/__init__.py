from . import apply, plan

__all__ = ['apply', 'plan']
