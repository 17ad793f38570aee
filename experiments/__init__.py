"""Scenario definitions and the experiment harness for shift simulations."""
