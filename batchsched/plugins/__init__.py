"""Built-in priority, gang and conformance plugins and their registration."""