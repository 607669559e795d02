"""scriptgate core: lifecycle, conditions, activation, host integration and config."""
