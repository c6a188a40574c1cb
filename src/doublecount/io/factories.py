"""Construct a reader or writer class from its name."""

from doublecount.utils.factory import instantiate, module_dict

from . import read, write

# Build a dictionary of available readers and writers
READER_DICT = module_dict(read)
WRITER_DICT = module_dict(write)


def reader_factory(reader_cfg):
    """Instantiates a reader from a configuration dictionary.

    Parameters
    ----------
    reader_cfg : dict
        Reader configuration dictionary

    Returns
    -------
    object
        Reader object
    """
    return instantiate(READER_DICT, reader_cfg)


def writer_factory(writer_cfg):
    """Instantiates a writer from a configuration dictionary.

    Parameters
    ----------
    writer_cfg : dict
        Writer configuration dictionary

    Returns
    -------
    object
        Writer object
    """
    return instantiate(WRITER_DICT, writer_cfg)
