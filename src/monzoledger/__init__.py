# Lazy so that importing the package does not load click and SQLAlchemy
def __getattr__(name):
    if name == "main":
        from monzoledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
