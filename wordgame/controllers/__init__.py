"""Controllers Package"""
