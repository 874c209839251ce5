pytest_plugins = ["objectmanager.integrations.pytest_plugin"]
