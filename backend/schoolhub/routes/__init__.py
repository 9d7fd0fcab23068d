"""
SchoolHub Backend — API Routes Package
========================================

Route Inventory:
    - saved_messages.py:  /api/users/{user_id}/saved-messages[/...]
    - health.py:          GET /health

Routes stay thin: parse the request, call a service, shape the response.
"""
