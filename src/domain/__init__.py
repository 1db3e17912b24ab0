"""Domain layer: content entities, contact form rules and resource facades.

- **models**: Project, Service, TeamMember and ContactMessage documents
- **validation**: Ordered field rules for contact submissions
- **facades**: One facade per resource, each over a single repository

Nothing here knows about HTTP; the API layer maps facade results and
exceptions to responses.
"""
