"""SpaceCat API: REST controllers for the site-auditing platform."""
