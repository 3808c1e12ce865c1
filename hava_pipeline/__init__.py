"""Hava source sync and diagram export pipeline."""
