"""
Core package: configuration model, builder, transition resolution, hook
invocation and the running state machine.
"""
