from taperscope.version import get_version

__version__ = get_version()
app_name = "taperscope"
