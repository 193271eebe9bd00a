"""Common code for messaging models."""


def resolve_class(cls_or_name, relative_cls: type = None) -> type:
    """Resolve a class reference which may be a class name in a sibling module."""
    if isinstance(cls_or_name, str):
        import sys

        module = sys.modules[relative_cls.__module__] if relative_cls else None
        resolved = getattr(module, cls_or_name, None) if module else None
        if not resolved:
            raise TypeError(
                "Could not resolve class {} relative to {}".format(
                    cls_or_name, relative_cls
                )
            )
        return resolved
    return cls_or_name


def resolve_meta_property(obj, prop_name: str, defval=None):
    """Resolve a meta property."""
    cls = obj.__class__
    found = defval
    while cls:
        Meta = getattr(cls, "Meta", None)
        if Meta and hasattr(Meta, prop_name):
            found = getattr(Meta, prop_name)
            break
        cls = cls.__bases__[0]
        if cls is object:
            break
    return found
