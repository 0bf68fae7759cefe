__all__ = [
    "paginate",
    "paged_query",
    "PageWindow",
    "hash_token",
    "verify_token",
    "CallerCredentials",
    "CallerResolver",
    "UserAuthResolver",
    "get_caller_resolver",
    "issue_user_auth",
]


def __getattr__(name):
    if name in {"paginate", "paged_query", "PageWindow"}:
        from . import pagination as _pagination
        return getattr(_pagination, name)
    if name in __all__:
        from . import security as _security
        return getattr(_security, name)
    raise AttributeError(f"module 'courseprofs.utils' has no attribute '{name}'")
