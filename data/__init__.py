"""Seed data package"""
