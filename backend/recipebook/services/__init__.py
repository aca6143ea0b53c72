# Services package init
"""
RecipeBook Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the managed collaborators.

Service Inventory:
    - IdentityProvider (abstract) / FirebaseIdentityProvider: accounts and tokens
    - DocumentStore (abstract) / FirestoreDocumentStore: user and recipe records
    - UserService: signup, login, signout, session checks, user details
    - FavoriteService: favorite recipe add/remove/list
    - RecipeService: recipe creation for the authenticated caller
"""
