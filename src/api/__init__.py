"""HTTP surface of the Tippspiel backend."""
