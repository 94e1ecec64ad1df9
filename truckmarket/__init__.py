"""
Truck-freight marketplace backend.

Drivers post truck listings, customers browse them, and the cargo
assistant turns free-text shipping requests into matching listings.
"""
