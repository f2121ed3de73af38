"""Domain layer — graph storage and BFS layering.

Pure Python with no I/O. Operations return tagged outcomes rather than
raising, so the service layer decides how each failure is surfaced.
"""
