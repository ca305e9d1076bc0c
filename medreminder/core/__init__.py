"""
Core components: domain building blocks, clock, scheduler context and
application wiring.
"""
