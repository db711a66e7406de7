"""Service layer tests"""
