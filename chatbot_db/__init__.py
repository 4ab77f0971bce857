"""
MongoDB bootstrap for the mental health chatbot knowledge base.
"""
