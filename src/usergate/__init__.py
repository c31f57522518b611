"""UserGate - authentication and user-management backend."""
