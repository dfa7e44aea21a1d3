"""Festival Finder: search for blues and swing dance festivals."""
