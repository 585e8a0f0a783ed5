"""Infrastructure layer — filesystem repository and template loading.

Infrastructure may import from the domain layer (for parsing), never from
services, commands, or output.
"""
