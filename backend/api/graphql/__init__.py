"""
GraphQL surface: schema, wire types, execution context and error formatting.
"""
