raise RuntimeError("platform module cannot be initialized on this host")
