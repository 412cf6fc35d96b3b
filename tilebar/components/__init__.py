"""Readers for battery, memory, network, keyboard and wireless status fields."""