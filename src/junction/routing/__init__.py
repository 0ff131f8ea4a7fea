"""Routing: per-method buckets of compiled pattern routers."""

from junction.routing.methods import HTTPMethod, bucket_for
from junction.routing.route import Route, RouteMatch
from junction.routing.router import Router
from junction.routing.table import MethodRouter, RouteTable

__all__ = ["HTTPMethod", "MethodRouter", "Route", "RouteMatch", "RouteTable", "Router", "bucket_for"]
