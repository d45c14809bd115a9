"""
Business logic services.

Each service handles one domain area. Import from the submodules
directly; models depend on services.image_list.
"""
