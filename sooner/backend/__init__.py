"""Sooner Backend Package

FastAPI REST API for accounts, tasks and the assistant, plus the JSON
document store they share.
"""
