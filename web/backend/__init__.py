"""FastAPI application, routes and settings"""
