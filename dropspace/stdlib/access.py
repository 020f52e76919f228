from dropspace import config


def export(kind=config.EXECUTE_EXPORT):
    """Marks a contract method as routable by the executor for the given message kind."""
    assert kind in (config.EXECUTE_EXPORT, config.QUERY_EXPORT), 'Unknown export kind {}.'.format(kind)

    def decorator(f):
        f.__export__ = kind
        return f

    return decorator


def exported(obj, name, kind):
    if name.startswith(config.PRIVATE_METHOD_PREFIX):
        return None

    f = getattr(obj, name, None)
    if f is None or getattr(f, '__export__', None) != kind:
        return None

    return f


def exports(obj, kind):
    return sorted(name for name in dir(obj) if exported(obj, name, kind) is not None)
