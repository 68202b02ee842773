__app_name__ = "ellipsis-meta"
__version__ = "0.3.0"
