"""Main function that calls the Driver class.

This is the module called when launching the command-line interface. It
sets up the `Driver` object and runs the check over the requested entries.
"""

from .driver import Driver


def run(cfg):
    """Run the double-counting check over every selected entry.

    Parameters
    ----------
    cfg : dict
        Full driver configuration

    Returns
    -------
    dict
        Number of entries checked and list of the entries which failed
    """
    driver = Driver(cfg)

    return driver.run()
