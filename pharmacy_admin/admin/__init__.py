"""
Product admin screen state: product collection, draft editor, view filters.

Entry point: admin.controller.ProductAdminController.
"""
