"""doomsday: command line front end for the doomsday certificate tracker."""

__all__ = ["__version__"]

__version__ = "0.4.0"
