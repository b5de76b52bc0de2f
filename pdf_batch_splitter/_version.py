__version__ = "20261017"
