from elementzones.scopes.interceptor import bind, bound_scope
from elementzones.scopes.stack import ScopeStack, default_clock
from elementzones.scopes.tree import ScopeTree

__all__ = ["ScopeStack", "ScopeTree", "bind", "bound_scope", "default_clock"]
