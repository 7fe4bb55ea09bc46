"""Resources: convention-based REST routing.

A controller is a mapping of action name to handler. Each controller
becomes one :class:`~perch.resources.resource.Resource`, which computes
a path template per action and registers it with a host router.
"""
