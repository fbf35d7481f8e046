"""Built-in tamper plugins.

Tampers are looked up through the PluginManager, not imported directly:
    manager = PluginManager()
    manager.register_builtin_plugins()
    tamper = manager.create_tamper("string_replace_multiple", options)
"""
