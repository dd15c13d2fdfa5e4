"""WebSocket Package"""
