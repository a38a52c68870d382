"""View rendering module for HTML templates.

Views own the compiled page template and turn a render context into
the HTML sent back to the client.
"""
