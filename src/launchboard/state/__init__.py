"""Observable fetch state and the serialized delivery context it is written from."""
