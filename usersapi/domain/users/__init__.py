"""Users domain: the User entity, its repository port and storage errors."""
