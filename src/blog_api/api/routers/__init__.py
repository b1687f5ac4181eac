"""
blog_api.api.routers

HTTP controllers: bind verbs/paths to service calls, authorize against the
resolved Principal, and render results through resources and the envelope.
"""

# Package marker; routers are imported directly from submodules.
