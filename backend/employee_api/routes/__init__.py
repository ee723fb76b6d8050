# Routes package init
"""
Employee API — Routes Package
==============================

Route Inventory:
    - employees.py:  GET    /employees        (list)
                     GET    /employees/{id}   (get)
                     PUT    /employees        (create)
                     POST   /employees/{id}   (partial update)
                     DELETE /employees/{id}   (delete)

Routes are thin: they call EmployeeGateway once and choose the status code.
"""
