"""
Template renderer: variables, conditions, data sources, element renderers
"""
