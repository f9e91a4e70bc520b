"""
Build host provisioner.

Collects reference assemblies, build extensions and the registration
utility from a development machine into a staging directory, and installs
them onto a build machine.
"""
