"""Pure domain services: field validation and the authority gate."""
