"""deploy-setup CLI commands"""
