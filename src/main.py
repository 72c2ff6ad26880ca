"""
Command-line client for the rental marketplace.
"""
import click
from typing import Any, Dict

from .client import HttpMarketplaceClient, MarketplaceClient, MockMarketplaceClient
from .utils.exceptions import MarketplaceError
from .utils.logger import setup_logger
from .utils.models import PropertyType, SearchFilters
from config.settings import api_config


def _format_location(location: Dict[str, Any]) -> str:
    return ", ".join(part for part in (location.get("city"), location.get("country")) if part)


def _format_booking(booking: Dict[str, Any]) -> str:
    listing = booking.get("listing") or {}
    title = listing.get("title") or booking["listing_id"]
    return (f"{booking['id']}  {title}  {booking['check_in']} -> {booking['check_out']}  "
            f"{booking['guests']} guests  ${booking['total_price']}  [{booking['status']}]")


def _fail(e: MarketplaceError) -> None:
    click.echo(f"Error: {e.message}")
    click.get_current_context().exit(1)


def _login(client: MarketplaceClient, email: str, password: str) -> None:
    try:
        client.login(email, password)
    except MarketplaceError as e:
        _fail(e)


@click.group()
@click.option('--mock/--no-mock', default=None,
              help='Use the in-process backend with demo data (default: MOCK_API)')
@click.option('--base-url', type=str, default=None,
              help='API base URL (default: API_BASE_URL)')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              default='WARNING', help='Logging level')
@click.pass_context
def cli(ctx, mock, base_url, log_level):
    """Search listings and manage bookings on the rental marketplace."""
    setup_logger("rental_marketplace", log_level)
    if isinstance(ctx.obj, MarketplaceClient):
        return
    use_mock = api_config.mock_api if mock is None else mock
    ctx.obj = MockMarketplaceClient() if use_mock else HttpMarketplaceClient(base_url=base_url)


@cli.command()
@click.option('--city', type=str, help='City (substring, case-insensitive)')
@click.option('--country', type=str, help='Country (substring, case-insensitive)')
@click.option('--type', 'property_type', type=click.Choice([p.value for p in PropertyType]),
              help='Property type')
@click.option('--min-price', type=int, help='Minimum nightly price')
@click.option('--max-price', type=int, help='Maximum nightly price')
@click.option('--guests', type=int, help='Minimum guest capacity')
@click.option('--bedrooms', type=int, help='Minimum bedrooms')
@click.option('--bathrooms', type=int, help='Minimum bathrooms')
@click.option('--amenity', 'amenities', multiple=True, help='Required amenity (repeatable)')
@click.option('--check-in', type=str, help='Only listings free from this date (YYYY-MM-DD)')
@click.option('--check-out', type=str, help='Only listings free until this date (YYYY-MM-DD)')
@click.option('--page', type=int, default=1, help='Page number')
@click.option('--limit', type=int, default=None, help='Listings per page')
@click.pass_obj
def search(client: MarketplaceClient, page, limit, **filters):
    """Search listings."""
    filters['amenities'] = list(filters['amenities'])
    try:
        result = client.search_listings(SearchFilters(**filters), page=page, limit=limit)
    except MarketplaceError as e:
        _fail(e)
        return

    for listing in result["listings"]:
        click.echo(f"{listing['id']}  {listing['title']}  ({listing['property_type']}, "
                   f"{_format_location(listing['location'])})  ${listing['price']}/night  "
                   f"up to {listing['max_guests']} guests")
    pagination = result["pagination"]
    click.echo(f"Page {pagination['page']}/{pagination['pages']} ({pagination['total']} listings)")


@cli.command()
@click.argument('listing_id')
@click.pass_obj
def show(client: MarketplaceClient, listing_id):
    """Show a listing with its host and reviews."""
    try:
        detail = client.get_listing(listing_id)
    except MarketplaceError as e:
        _fail(e)
        return

    listing = detail["listing"]
    host = listing.get("host") or {}
    click.echo(f"{listing['title']} ({listing['property_type']})")
    click.echo(f"  Location: {_format_location(listing['location'])}")
    click.echo(f"  Price: ${listing['price']}/night, up to {listing['max_guests']} guests")
    click.echo(f"  Bedrooms: {listing['bedrooms']}, Bathrooms: {listing['bathrooms']}")
    click.echo(f"  Amenities: {', '.join(listing['amenities'])}")
    if host:
        click.echo(f"  Host: {host.get('first_name', '')} {host.get('last_name', '')}".rstrip())
    click.echo(f"  Rating: {listing['rating']} ({len(detail['reviews'])} reviews)")
    for review in detail["reviews"]:
        reviewer = review.get("user") or {}
        click.echo(f"    {review['rating']}/5 {reviewer.get('first_name', 'Guest')}: {review['comment']}")


@cli.command()
@click.argument('listing_id')
@click.argument('start_date')
@click.argument('end_date')
@click.pass_obj
def availability(client: MarketplaceClient, listing_id, start_date, end_date):
    """Check whether a listing is free between two dates."""
    try:
        result = client.get_availability(listing_id, start_date, end_date)
    except MarketplaceError as e:
        _fail(e)
        return

    if result.available:
        click.echo("Available")
        return
    click.echo("Not available for selected dates")
    for blocked in result.blocked_dates:
        click.echo(f"  booked {blocked['check_in']} -> {blocked['check_out']}")


@cli.command()
@click.argument('listing_id')
@click.argument('check_in')
@click.argument('check_out')
@click.pass_obj
def quote(client: MarketplaceClient, listing_id, check_in, check_out):
    """Price a stay including the service fee."""
    try:
        price = client.get_quote(listing_id, check_in, check_out)
    except MarketplaceError as e:
        _fail(e)
        return

    click.echo(f"${price.nightly_price} x {price.nights} nights = ${price.subtotal}")
    click.echo(f"Service fee: ${price.service_fee}")
    click.echo(f"Total: ${price.total}")


def _credentials(f):
    f = click.option('--password', envvar='MARKETPLACE_PASSWORD', required=True, help='Account password')(f)
    f = click.option('--email', envvar='MARKETPLACE_EMAIL', required=True, help='Account email')(f)
    return f


@cli.command()
@click.argument('listing_id')
@click.argument('check_in')
@click.argument('check_out')
@click.option('--guests', type=int, default=1, help='Number of guests')
@_credentials
@click.pass_obj
def book(client: MarketplaceClient, listing_id, check_in, check_out, guests, email, password):
    """Book a listing."""
    _login(client, email, password)
    try:
        booking = client.create_booking(listing_id, check_in, check_out, guests)
    except MarketplaceError as e:
        _fail(e)
        return

    click.echo(f"Booking confirmed: {booking['id']}")
    click.echo(f"  {booking['check_in']} -> {booking['check_out']}, {booking['guests']} guests")
    click.echo(f"  Total: ${booking['total_price']}")


@cli.command()
@click.argument('booking_id')
@_credentials
@click.pass_obj
def cancel(client: MarketplaceClient, booking_id, email, password):
    """Cancel a booking as its guest or host."""
    _login(client, email, password)
    try:
        booking = client.cancel_booking(booking_id)
    except MarketplaceError as e:
        _fail(e)
        return

    click.echo(f"Booking {booking['id']} is {booking['status']}")


@cli.command()
@click.option('--host', 'as_host', is_flag=True, help='Show bookings on your listings instead of your trips')
@_credentials
@click.pass_obj
def bookings(client: MarketplaceClient, as_host, email, password):
    """List your trips, or reservations on your listings."""
    _login(client, email, password)
    try:
        items = client.get_host_bookings() if as_host else client.get_user_bookings()
    except MarketplaceError as e:
        _fail(e)
        return

    if not items:
        click.echo("No bookings")
        return
    for booking in items:
        click.echo(_format_booking(booking))


def main():
    cli()


if __name__ == '__main__':
    main()
