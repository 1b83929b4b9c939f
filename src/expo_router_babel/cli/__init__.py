"""
CLI Subpackage.

Modules:
    - ``__main__``: The argparse definition and dispatcher.
    - ``commands``: Facade re-exporting the handlers.
    - ``handlers/*``: One module per command (transform, resolve).
"""
