"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for one table.
Every query is scoped by the owning user's ID; repositories return
domain model objects and translate database failures into RemoteError.
"""
