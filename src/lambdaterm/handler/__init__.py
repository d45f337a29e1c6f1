"""Request handling for lambdaterm.

``lambda_handler`` is the function the hosting runtime invokes with each
event.
"""

from lambdaterm.handler.request_handler import RequestHandler, ensure_on_path, lambda_handler

__all__ = ["RequestHandler", "ensure_on_path", "lambda_handler"]
