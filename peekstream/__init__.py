"""Event models, CEF and Snoopy parsers, inventory records and an IoC/asset oracle WSGI app."""

__version__ = "0.1.0"