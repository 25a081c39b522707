"""
rtlsim: a cycle-based register-transfer-level simulator.

Circuits are built from clocked registers and combinational logic units.
Every cycle the simulator evaluates all logic against the values the
registers committed at the previous cycle boundary, then commits all
registers at once.

Core concepts:
- Port: the signals crossing one interconnection point
- Register: committed value (visible) + staged value (next cycle)
- Logic: reads committed values, writes staged values
- Simulator: evaluate, then commit, once per cycle
"""

__version__ = "0.1.0"
