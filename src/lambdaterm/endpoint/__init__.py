"""Local HTTP endpoint module for lambdaterm.

Serves the request handler over plain HTTP for development, standing in
for the function URL and runtime wrapper of a real deployment.
"""
