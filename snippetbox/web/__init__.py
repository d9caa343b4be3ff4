"""Web layer: route table, request handlers and their helpers.

Handlers render the cached Jinja2 pages and talk to the data stores kept on
``app.state``.
"""
