"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instantiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy

from .logger import logger


def module_dict(module):
    """Converts a module into a dictionary which maps class names onto classes.

    Each class is registered under its own name and, if it defines one,
    under its `name` attribute (the name used in configuration files).

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    classes = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name.startswith("_"):
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        classes[cls_name] = cls
        if getattr(cls, "name", ""):
            classes[cls.name] = cls

    return classes


def instantiate(module_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary and a list of
    possible classes to chose from.

    The configuration block is expected to look like:

    .. code-block:: yaml

        reader:
          name: hdf5
          kwarg_1: value_1
          kwarg_2: value_2

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps a class name onto an object class.
    cfg : Union[str, dict]
        Configuration dictionary, or simply the class name
    alt_name : str, optional
        Key under which the class name can be specified, beside 'name' itself
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, it is a class name with no parameters
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    name = "name"
    if alt_name is not None and alt_name in config:
        assert "name" not in config, f"Should specify one of `name` or `{alt_name}`"
        name = alt_name
    assert name in config, "Could not find the name of the class under `name`"

    class_name = config.pop(name)
    if class_name not in module_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps "
            f"names to classes. Available names: {list(module_dict.keys())}"
        )

    # Everything left in the block is a keyword argument
    for key in config:
        assert key not in kwargs, (
            f"The keyword argument {key} is provided both in the "
            "configuration and by the caller. Ambiguous."
        )
    kwargs.update(config)

    cls = module_dict[class_name]
    try:
        return cls(**kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments:\n  - kwargs: %s",
            cls.__name__,
            kwargs,
        )

        raise err
