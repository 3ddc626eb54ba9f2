"""
Flask CLI commands:  flask cleanup-uploads / flask generate-secret
"""
import click
from flask import current_app

from maintenance import cleanup_uploads, generate_secret


def register_commands(app):

    @app.cli.command('cleanup-uploads')
    @click.option('--dir', 'uploads_dir', default=None,
                  help='Directory to scan (defaults to UPLOAD_FOLDER).')
    @click.option('--max-age-days', type=int, default=None,
                  help='Delete files older than this many days.')
    @click.option('--min-size-bytes', type=int, default=None,
                  help='Delete files smaller than this many bytes.')
    def cli_cleanup_uploads(uploads_dir, max_age_days, min_size_bytes):
        """Delete stale or empty files from the uploads directory."""
        config = current_app.config
        uploads_dir = uploads_dir or config['UPLOAD_FOLDER']
        if max_age_days is None:
            max_age_days = config['UPLOAD_MAX_AGE_DAYS']
        if min_size_bytes is None:
            min_size_bytes = config['UPLOAD_MIN_SIZE_BYTES']

        click.echo('Cleaning up {}...'.format(uploads_dir))
        result = cleanup_uploads(uploads_dir, max_age_days=max_age_days,
                                 min_size_bytes=min_size_bytes)
        click.echo('  Deleted: {} files ({:.2f} KB)'.format(
            result['deleted'], result['bytes_deleted'] / 1024))
        click.echo('  Kept: {} files'.format(result['kept']))
        if result['errors']:
            click.echo('  Errors: {}'.format(result['errors']), err=True)

    @app.cli.command('generate-secret')
    @click.option('--bytes', 'num_bytes', type=int, default=64, show_default=True,
                  help='Number of random bytes in the secret.')
    def cli_generate_secret(num_bytes):
        """Print a random secret suitable for JWT_SECRET_KEY."""
        try:
            secret = generate_secret(num_bytes)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint='--bytes')
        click.echo(secret)
        click.echo('Add this to your environment variables as JWT_SECRET_KEY.', err=True)
        click.echo('Keep it secret and never commit it to version control.', err=True)
