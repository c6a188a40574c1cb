"""Docstring inheritance utilities."""


def inherit_docstring(*parents):
    """Appends the attribute block of the parent class docstrings to the
    attribute block of the decorated class docstring.

    Only handles numpy-style docstrings.

    Parameters
    ----------
    *parents : List[object]
        Parent class(es) to inherit attributes from

    Returns
    -------
    callable
        Class decorator
    """

    def inherit(obj):
        tab = "    "
        header = f"Attributes\n{tab}----------\n"

        # If there is no attribute block yet, add the header
        if header not in obj.__doc__:
            obj.__doc__ = obj.__doc__.rstrip() + f"\n\n{tab}{header}"

        # Fetch the attribute block of each parent, up to the next section
        parent_attrs = ""
        for parent in parents:
            block = parent.__doc__.split(header)[-1]
            lines = block.rstrip().split("\n")
            if len(lines) > 1 and set(lines[-1].strip()) == {"-"}:
                lines = lines[:-2]
            parent_attrs += "\n".join(lines).rstrip() + "\n"

        # Append it at the start of the attribute block
        before, after = obj.__doc__.split(header, 1)
        obj.__doc__ = before + header + parent_attrs + after

        return obj

    return inherit
