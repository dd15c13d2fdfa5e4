"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj) -> Dict[str, Optional[str]]:
    """Extract user identity information from a request (HTTP or Socket.IO)."""
    if request_obj is None:
        return {'user_ip': 'system', 'session_id': None}

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)  # Socket.IO only
    }


def error_payload(error: Exception) -> Dict:
    """Client-facing error body for a game error."""
    return {
        'success': False,
        'error': str(error),
        'error_code': getattr(error, 'error_code', 'internal_error')
    }
