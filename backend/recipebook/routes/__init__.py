# Routes package init
"""
RecipeBook Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:      POST /signup, /login, /signout, /check-session
                     GET  /fetch-user-details
    - favorites.py:  POST /save-favorites
                     GET  /fetch-favorites/{userId}
    - recipes.py:    POST /add_recipe               (bearer token)
    - testing.py:    POST /delete_users             (test environments only)
    - health.py:     GET  /health

Routes stay THIN: pull data from the request, call a service, shape the
response. Field checks and status mapping live in the services.
"""
