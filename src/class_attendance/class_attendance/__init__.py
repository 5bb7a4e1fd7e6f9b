"""Class attendance package.

Feature modules (attendance, statistics, class_counter) each expose a thin
Flask controller on top of framework-free service and repository layers.
"""
