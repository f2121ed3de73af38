"""Infrastructure layer — file I/O, template loading, and graph views.

Infrastructure modules may import from domain. They must never import
from services, commands, or output.
"""
