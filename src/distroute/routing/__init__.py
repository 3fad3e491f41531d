"""Routing — pattern compilation, matching and first-match dispatch.

Routes are registered during setup and the route list is frozen before
the first request is dispatched.
"""
