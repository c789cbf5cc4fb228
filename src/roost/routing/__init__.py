"""Routing — ordered route table, history binding, and lazy views.

Routes are registered during setup and matched in registration order
once the router is installed.
"""
