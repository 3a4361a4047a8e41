"""Mentor portal domain - dashboard, tasks, availability, earnings and activity"""
