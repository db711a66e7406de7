"""API endpoint tests"""
