"""Command-line front ends for gammaconv."""
