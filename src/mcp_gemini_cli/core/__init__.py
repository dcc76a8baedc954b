"""Engine core: errors, environment, logging, configuration, argument building."""
