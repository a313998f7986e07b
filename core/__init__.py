"""Core application for the spa reservation backend.

This package contains the models, serializers, services, views and
route registrations of the administration and reservation API.
"""
