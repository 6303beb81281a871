"""Built-in CLI commands for oasmodel.

* :mod:`~oasmodel.commands.check` -- decode a document and report the
  first structural error.
* :mod:`~oasmodel.commands.fmt` -- decode and re-encode canonically.
* :mod:`~oasmodel.commands.refs` -- count schema component references.

Each module exports a plain callback function registered directly on the
root app in :mod:`oasmodel.app`.
"""
