"""Hotels app package.

Hotels are the bookable places. Anyone may browse them, only
administrators may create, change or remove them. Removing a hotel
removes its bookings.
"""
