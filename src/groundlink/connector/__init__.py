"""
The connector package manages the single live link to the vehicle: the registry that holds it,
and the manager that replaces and tears it down.
"""
